from __future__ import annotations

import reflex as rx

from .components import MonacoEditor
from .routes import make_export_route
from .state import ExportState, project_exporter, project_repository


COLORS = {
    "bg_primary": "#0a0a0b",
    "bg_secondary": "#151518",
    "bg_tertiary": "#1a1a1d",
    "border": "#27272a",
    "text_primary": "#ffffff",
    "text_secondary": "#a1a1aa",
    "accent_green": "#00ef8b",
    "accent_cyan": "#06b6d4",
    "error": "#ef4444",
}


def card(*children, **kwargs) -> rx.Component:
    default_style = {
        "background": COLORS["bg_secondary"],
        "border": f"1px solid {COLORS['border']}",
        "border_radius": "12px",
        "padding": "24px",
        "display": "flex",
        "flex_direction": "column",
        "gap": "16px",
        "width": "100%",
    }
    return rx.box(*children, **{**default_style, **kwargs})


def styled_button(text: str, color_scheme: str = "cyan", **kwargs) -> rx.Component:
    return rx.button(
        text,
        color_scheme=color_scheme,
        size="3",
        cursor="pointer",
        **kwargs,
    )


def header() -> rx.Component:
    return rx.vstack(
        rx.heading(
            "Flow Playground Export",
            size="8",
            background=f"linear-gradient(135deg, {COLORS['accent_green']} 0%, {COLORS['accent_cyan']} 100%)",
            background_clip="text",
            color="transparent",
            font_weight="700",
        ),
        rx.text(
            "Turn a playground project into a flow-js-testing scaffold with one test per contract, transaction and script.",
            color=COLORS["text_secondary"],
            size="3",
        ),
        padding_y="32px",
        width="100%",
    )


def project_section() -> rx.Component:
    return card(
        rx.heading("Project", size="5", color=COLORS["text_primary"]),
        rx.input(
            placeholder="Project ID",
            value=ExportState.project_id,
            on_change=ExportState.update_project_id,
            width="100%",
        ),
        rx.cond(
            ExportState.project_error != "",
            rx.text(ExportState.project_error, color=COLORS["error"], size="2"),
            rx.fragment(),
        ),
        rx.hstack(
            styled_button("New Project", color_scheme="gray", on_click=ExportState.create_project),
            styled_button("Preview Tests", on_click=ExportState.preview_tests),
            styled_button(
                "Export Project",
                color_scheme="green",
                loading=ExportState.exporting,
                on_click=ExportState.export_project,
            ),
            spacing="3",
        ),
        rx.cond(
            ExportState.export_message != "",
            rx.text(
                ExportState.export_message,
                color=rx.cond(ExportState.export_is_error, COLORS["error"], COLORS["accent_green"]),
                size="2",
            ),
            rx.fragment(),
        ),
    )


def preview_section() -> rx.Component:
    return card(
        rx.heading("test/index.test.js", size="5", color=COLORS["text_primary"]),
        MonacoEditor.create(value=ExportState.test_preview),
    )


def log_entry_item(entry) -> rx.Component:
    return rx.hstack(
        rx.badge(entry["level_label"], color=entry["color"], variant="soft"),
        rx.text(entry["timestamp"], color=COLORS["text_secondary"], size="1"),
        rx.text(entry["message"], color=COLORS["text_primary"], size="2"),
        gap="8px",
        width="100%",
    )


def log_section() -> rx.Component:
    return card(
        rx.hstack(
            rx.heading("Activity Log", size="5", color=COLORS["text_primary"]),
            rx.spacer(),
            styled_button("Clear Log", color_scheme="orange", on_click=ExportState.clear_logs),
            width="100%",
        ),
        rx.cond(
            ExportState.log_entries == [],
            rx.text("Exports and previews will appear here.", color=COLORS["text_secondary"], size="2"),
            rx.vstack(
                rx.foreach(ExportState.log_entries, log_entry_item),
                gap="8px",
                width="100%",
            ),
        ),
    )


def index() -> rx.Component:
    return rx.box(
        rx.vstack(
            header(),
            project_section(),
            preview_section(),
            log_section(),
            spacing="5",
            width="100%",
            max_width="1100px",
            margin_x="auto",
            padding_x=["16px", "24px", "32px"],
            padding_bottom="64px",
        ),
        background=COLORS["bg_primary"],
        min_height="100vh",
        width="100%",
    )


app = rx.App(
    theme=rx.theme(
        appearance="dark",
        accent_color="cyan",
        gray_color="slate",
        radius="large",
    ),
)

app.add_page(index, title="Flow Playground Export")

app._api.add_route(
    "/projects/{project_id}/export",
    make_export_route(project_repository, project_exporter),
    methods=["GET"],
)
