"""
API package containing versioned routes and the request-scoped
service dependencies shared by every version.
"""
