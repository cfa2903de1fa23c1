# metrycs/features/api.py
from fastapi import APIRouter
from metrycs.features import events, metrics, reporting, export

api_router = APIRouter()

api_router.include_router(events.router)
api_router.include_router(metrics.router)
api_router.include_router(reporting.router)
api_router.include_router(export.router)
