"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web

from lsrv.core.renderer import TemplateSet
from lsrv.core.store import PageStore

store_key = web.AppKey("store", PageStore)
templates_key = web.AppKey("templates", TemplateSet)
content_dir_key = web.AppKey("content_dir", Path)
