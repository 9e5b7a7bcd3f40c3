"""Core output primitives (light animations and input-handler directives).

Kept free of storage and request-envelope concerns so the round logic, the
request handler, and tests can all build and inspect directives the same way.
"""
