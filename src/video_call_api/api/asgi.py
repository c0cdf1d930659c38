"""ASGI entrypoint for the video call API."""

from video_call_api.api.app import create_app
from video_call_api.containers import build_container

app = create_app(build_container())
