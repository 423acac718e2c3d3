"""Properties app package.

This app encapsulates property listings and their rooms, the owner-side
inventory endpoints and the public availability search.
"""
