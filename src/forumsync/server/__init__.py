"""
HTTP trigger for sync cycles.

Run with:
    uvicorn forumsync.server.app:app
"""
