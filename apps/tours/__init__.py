"""Tours app package.

Guided tours run by tour operators. Each tour date has its own
participant capacity; adults, children and seniors are priced separately.
"""
