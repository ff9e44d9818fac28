"""Hotels app package.

Hotel properties, their room types and room reservations. A room type
may have several identical units; availability is the number of units
not taken on the busiest night of the requested stay.
"""
