"""Core building blocks shared by the stores and the server."""
