"""Internal modules for netconnection.

WARNING: These modules back RequestDispatcher and are not a stable API.

Modules:
    http - Shared HTTP client configuration and background transport
    forms - Request body builders
    callbacks - Designated-thread callback executors
    connectivity - Network reachability checks
    redaction - Redaction of sensitive values in debug output
"""
