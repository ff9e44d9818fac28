"""Transfers app package.

Chauffeured vehicles for airport and point-to-point rides. A vehicle is
booked for a pickup moment and stays blocked for a few hours around it.
"""
