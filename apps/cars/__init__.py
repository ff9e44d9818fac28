"""Cars app package.

Rental vehicles listed by car owners and the rentals guests make for a
pickup-to-return date range. A vehicle is a single unit of inventory.
"""
