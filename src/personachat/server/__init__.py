"""Persona Chat server: the AI chat function and the REST table API.

Keep this package import side-effect free: importing `personachat.server.*`
should not build the FastAPI app.
"""

__all__ = ["create_app"]


def create_app(*args, **kwargs):
	from .main import create_app as _create_app

	return _create_app(*args, **kwargs)
