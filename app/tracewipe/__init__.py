"""tracewipe - locate and destroy shell history and log artifacts.

Overwriting is best-effort. On journaling, copy-on-write or flash media
the old blocks may survive elsewhere on the device, so tracewipe does not
provide forensic-grade erasure.
"""

__version__ = "0.3.0"
