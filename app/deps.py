"""
Shared request dependencies: the store and analyzer built in app.main's lifespan.
"""
from fastapi import Request

from app.core.config import Settings
from app.db.memory import MemoryStore
from app.utils.analyzer import FinanceAnalyzer


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_analyzer(request: Request) -> FinanceAnalyzer:
    return request.app.state.analyzer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
