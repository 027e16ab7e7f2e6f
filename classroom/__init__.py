"""LinuxWorld Classroom: notification fan-out and recipient resolution.

The package re-exports nothing; import from the layer that owns a concern.
"""
