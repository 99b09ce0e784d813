from .viewport_dto import Viewport
