"""
This module contains functions for parallel backend discovery.
"""


def thread_id():
    """Returns the identifier of the thread pool backend."""
    return 'threads'


def ocl_id():
    """Returns the identifier of the ``PyOpenCL``-based backend."""
    return 'ocl'


def backend_ids():
    """
    Returns a list of identifiers for all known
    (not necessarily available for the current system) backends.
    """
    return [thread_id(), ocl_id()]


def supports_backend(backend_id):
    """
    Returns ``True`` if given backend is supported.
    """
    try:
        get_backend(backend_id)
    except ImportError:
        return False

    return True


def supported_backend_ids():
    """
    Returns a list of identifiers of supported backends.
    """
    return [backend_id for backend_id in backend_ids() if supports_backend(backend_id)]


def get_backend(backend_id):
    """
    Returns a backend module for the given identifier.
    Every backend module has an ``Engine`` class providing the four norm methods
    taking ``(matrix, parallelism)``.
    """
    if backend_id == thread_id():
        import normbench.backends.threads
        return normbench.backends.threads
    elif backend_id == ocl_id():
        import normbench.backends.ocl
        return normbench.backends.ocl
    else:
        raise ValueError("Unrecognized backend: " + str(backend_id))

