"""
Form schema engine.

This package holds the form builder core: the field model, localization
overlays, options editing, reordering, multi-step navigation and the preview
projector that the real submission form shares.

- Library entrypoints: `schema_io`, `localization`, `steps`, `preview.projector`
- HTTP facade: `form_schema_engine.api.main:app`
"""

__version__ = "0.1.0"
