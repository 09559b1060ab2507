"""
API I/O schemas.

Pydantic request and response models of the REST API, one module per
resource family. Read models are built from entities with ``from_attributes``.
"""
