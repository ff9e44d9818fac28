"""Chat app package.

Direct and group conversations between marketplace users, stored through
the ORM and pushed to connected clients over WebSocket.
"""
