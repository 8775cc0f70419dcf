from fastapi import Request

from .repository import Repository
from .services import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_repository(request: Request) -> Repository:
    return request.app.state.services.repo
