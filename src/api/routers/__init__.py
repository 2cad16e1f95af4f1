from fastapi import APIRouter

from api.routers import restaurant

ROUTERS: list[APIRouter] = [restaurant.router]
