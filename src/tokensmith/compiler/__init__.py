"""
Render-time token compiler.

normalizer -> class_names for responsive spacing classes;
registry -> css_generator for preset stylesheets; utilities for the
spacing utility stylesheet; context ties them to settings and the cache.
"""

from .class_names import (
    SPACING_MARKER,
    append_classes,
    compile_class_name,
    compile_responsive,
    compile_responsive_list,
    compile_spacing_classes,
)
from .context import CompilerContext, build_cache, build_context, build_store
from .css_generator import generate, generate_all, process_value, sanitize_property
from .normalizer import MalformedHook, normalize, parse_token_entry
from .registry import (
    PresetRegistry,
    canonical_property_name,
    derive_label,
    load_presets,
    load_source_document,
)
from .utilities import generate_utilities_css, normalize_spacing_sizes

__all__ = [
    # Normalizer
    "MalformedHook",
    "normalize",
    "parse_token_entry",
    # Class names
    "SPACING_MARKER",
    "append_classes",
    "compile_class_name",
    "compile_responsive",
    "compile_responsive_list",
    "compile_spacing_classes",
    # Registry
    "PresetRegistry",
    "canonical_property_name",
    "derive_label",
    "load_presets",
    "load_source_document",
    # CSS
    "generate",
    "generate_all",
    "process_value",
    "sanitize_property",
    "generate_utilities_css",
    "normalize_spacing_sizes",
    # Context
    "CompilerContext",
    "build_cache",
    "build_context",
    "build_store",
]
