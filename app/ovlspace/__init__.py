"""ovlspace - overlay space manager.

Monitors the writable overlay layer, reclaims space from known caches
and relocates heavy directories out of the overlay behind symlinks.
"""

__version__ = "0.1.0"
