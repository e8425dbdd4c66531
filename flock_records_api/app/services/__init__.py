"""
Service layer.

``FlockRepository`` performs in-memory bookkeeping over one loaded
document; ``RecordService`` validates requests and runs the
load/mutate/save cycle around it.
"""
