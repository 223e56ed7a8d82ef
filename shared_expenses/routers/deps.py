from fastapi import Request

from shared_expenses.core.config import Settings
from shared_expenses.services.controller import ExpenseTrackerController


def get_controller(request: Request) -> ExpenseTrackerController:
    return request.app.state.controller


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
