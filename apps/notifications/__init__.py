"""Notifications app package.

Delivers reservation emails. Sending happens in Celery tasks so the
request that confirmed or expired a reservation never waits on SMTP.
"""
