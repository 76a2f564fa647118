"""
Business services for Tripper.

Each module owns one entity group and authorizes through ``access``:
- trips.py, locations.py, categories.py, members.py, attachments.py
- users.py: identity mirror and the post-sign-in hook
- places.py: Foursquare search proxy
- migration.py: category data migration
"""

__all__: list[str] = []
