"""Reflex runtime configuration for the export app."""

from __future__ import annotations

import os

import reflex as rx


os.environ.setdefault("REFLEX_SSR", "0")

config = rx.Config(
    app_name="flow_playground",
    frontend_port=3000,
    backend_port=8000,
    show_built_with_reflex=False,
    disable_plugins=["reflex.plugins.sitemap.SitemapPlugin"],
)
