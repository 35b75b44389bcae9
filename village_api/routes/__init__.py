"""
Village Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:           /login, /signup, /user/profile, /user/profile/update
    - admin.py:          activation queue, admin and citizen accounts, /admins
    - announcements.py:  /createAnnouncement, /announcements, update/delete
    - feedback.py:       suggestions and queries
    - crops.py:          places, crops, prices, /crops/{placeId}
    - health.py:         /health

Routes are thin: read the request, call one service method, shape the
response. Errors travel as exceptions to the handlers in main.py.
"""

from typing import Annotated

from fastapi import Path

from village_api.schemas.common import MAX_RECORD_ID, MIN_RECORD_ID

# Entity id taken from the URL; out-of-range values are rejected with 400
RecordIdPath = Annotated[int, Path(ge=MIN_RECORD_ID, le=MAX_RECORD_ID)]
