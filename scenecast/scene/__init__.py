"""
This package defines the scene entities sent to the viewer and how they are assembled.

Submodules with an entity name (geometry, material, texture, object_) define plain values. lumped.py wires them
into the unit sent by a set_object command. loaders.py and description.py build entities for common cases.
"""
