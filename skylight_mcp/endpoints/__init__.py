"""Per-resource wrappers translating domain operations into Skylight requests.

Every function takes the ``SkylightClient`` to use as its first argument.
Failures raised by the client propagate unchanged.
"""
