"""Template service - static catalog of text style templates."""

from __future__ import annotations

import logging

from src.models.errors import NotFoundError
from src.models.overlay_template import TextTemplate
from src.models.style import TextStyle

logger = logging.getLogger(__name__)


_BUILTIN_TEMPLATES: list[dict] = [
    {
        "template_id": "title",
        "name": "عنوان رئيسي",
        "category": "titles",
        "style": {
            "font_size": 48, "font_family": "Montserrat", "font_weight": "bold",
            "color": "#ffffff", "stroke_color": "#000000", "stroke_width": 2,
            "background_color": "transparent", "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 0, 0, 0.7)", "shadow_blur": 10,
            "shadow_offset_x": 2, "shadow_offset_y": 2,
        },
    },
    {
        "template_id": "subtitle",
        "name": "عنوان فرعي",
        "category": "titles",
        "style": {
            "font_size": 32, "font_family": "Montserrat", "font_weight": "normal",
            "color": "#ffffff", "stroke_color": "#000000", "stroke_width": 1,
            "background_color": "transparent", "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 0, 0, 0.5)", "shadow_blur": 5,
            "shadow_offset_x": 1, "shadow_offset_y": 1,
        },
    },
    {
        "template_id": "caption",
        "name": "تعليق توضيحي",
        "category": "captions",
        "style": {
            "font_size": 24, "font_family": "Open Sans", "font_weight": "normal",
            "color": "#ffffff", "stroke_color": "transparent", "stroke_width": 0,
            "background_color": "rgba(0, 0, 0, 0.5)", "padding": 10, "border_radius": 5,
            "text_align": "center", "shadow": False,
        },
    },
    {
        "template_id": "quote",
        "name": "اقتباس",
        "category": "quotes",
        "style": {
            "font_size": 36, "font_family": "Georgia", "font_weight": "normal",
            "font_style": "italic", "color": "#ffffff", "stroke_color": "transparent",
            "stroke_width": 0, "background_color": "rgba(0, 0, 0, 0.3)", "padding": 15,
            "border_radius": 10, "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 0, 0, 0.3)", "shadow_blur": 3,
            "shadow_offset_x": 1, "shadow_offset_y": 1,
        },
    },
    {
        "template_id": "lower-third",
        "name": "شريط سفلي",
        "category": "lower-thirds",
        "style": {
            "font_size": 28, "font_family": "Roboto", "font_weight": "bold",
            "color": "#ffffff", "stroke_color": "transparent", "stroke_width": 0,
            "background_color": "rgba(0, 100, 200, 0.7)", "padding": 12, "border_radius": 0,
            "text_align": "left", "shadow": False,
        },
    },
    {
        "template_id": "arabic-title",
        "name": "عنوان عربي",
        "category": "arabic",
        "style": {
            "font_size": 42, "font_family": "Cairo", "font_weight": "bold",
            "color": "#ffffff", "stroke_color": "#000000", "stroke_width": 1,
            "background_color": "transparent", "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 0, 0, 0.6)", "shadow_blur": 8,
            "shadow_offset_x": 2, "shadow_offset_y": 2,
        },
    },
    {
        "template_id": "arabic-subtitle",
        "name": "عنوان فرعي عربي",
        "category": "arabic",
        "style": {
            "font_size": 30, "font_family": "Tajawal", "font_weight": "normal",
            "color": "#ffffff", "stroke_color": "#000000", "stroke_width": 1,
            "background_color": "transparent", "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 0, 0, 0.4)", "shadow_blur": 4,
            "shadow_offset_x": 1, "shadow_offset_y": 1,
        },
    },
    {
        "template_id": "neon",
        "name": "نيون",
        "category": "effects",
        "style": {
            "font_size": 36, "font_family": "Montserrat", "font_weight": "bold",
            "color": "#ffffff", "stroke_color": "#00ffff", "stroke_width": 2,
            "background_color": "transparent", "text_align": "center",
            "shadow": True, "shadow_color": "rgba(0, 255, 255, 0.8)", "shadow_blur": 15,
            "shadow_offset_x": 0, "shadow_offset_y": 0,
        },
    },
]


class TemplateRegistry:
    """Read-only catalog of built-in text templates."""

    def __init__(self, templates: list[TextTemplate] | None = None):
        if templates is None:
            templates = [TextTemplate.from_dict(item) for item in _BUILTIN_TEMPLATES]
        self._templates: dict[str, TextTemplate] = {t.template_id: t for t in templates}
        logger.debug(f"Template catalog loaded: {len(self._templates)} templates")

    # ------------------------------------------------------------------ Query

    def list_templates(self, category: str | None = None) -> list[TextTemplate]:
        items = list(self._templates.values())
        if category:
            items = [t for t in items if t.category == category]
        return items

    def get_template(self, template_id: str) -> TextTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise NotFoundError(f"Template not found: {template_id}")
        return template

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    # ------------------------------------------------------------------ Merge

    @staticmethod
    def merged_style(style: TextStyle, template: TextTemplate) -> TextStyle:
        """Template fields always win; fields it does not define are kept."""
        return style.merged(template.style)
