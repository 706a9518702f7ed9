"""
Endpoint subpackage.

Each module defines an APIRouter for one domain.  The routers are
aggregated in ``api/router.py`` and included in the main application.
"""
