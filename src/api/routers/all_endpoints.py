# File: api/routers/all_endpoints.py

from fastapi import APIRouter

from api.routers.comments import comments
from api.routers.dashboard import dashboard
from api.routers.likes import likes
from api.routers.playlists import playlists
from api.routers.subscriptions import subscriptions
from api.routers.utility_routes import router as utility_router
from api.routers.videos import videos


# Main router
all_routers = APIRouter()

# Include routers
all_routers.include_router(videos.router)
all_routers.include_router(comments.router)
all_routers.include_router(likes.router)
all_routers.include_router(subscriptions.router)
all_routers.include_router(playlists.router)
all_routers.include_router(dashboard.router)

all_routers.include_router(utility_router)
