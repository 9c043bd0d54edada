"""
This package defines the commands sent to the viewer and the client that sends them.
"""
