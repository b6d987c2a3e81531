"""
This package contains all modules related to parsing and decoding data
received from BlueZ for nearby earbuds.

Sub-packages handle specific concerns:

- ``values``: Typed D-Bus value trees, conversion and marker search.
- ``status``: Fixed-layout status byte decoding and the reading latch.
"""
