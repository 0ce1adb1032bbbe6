"""Core scrubbing engine.

This package provides the configuration model, pattern compilation, span
matching and resolution, literal rewriting and the engine that ties them
together.

Classes:
    ScrubConfig: Configuration data model
    ScrubEngine: Immutable engine built once per configuration
    CompiledPattern: A configured pattern with its compiled matcher
    MatchSpan: A matched code-point range
    RewriteResult: New text of one literal
    ScrubError: Base exception
    InvalidPatternSyntax: Exception for patterns that do not compile
    ConfigurationError: Exception for malformed configurations
"""

from scrubber.core.config import ScrubConfig
from scrubber.core.config_loader import load_config, parse_config_json, save_config
from scrubber.core.engine import ScrubEngine
from scrubber.core.errors import ConfigurationError, InvalidPatternSyntax, ScrubError
from scrubber.core.matching import MatchSpan, resolve, scan
from scrubber.core.patterns import CompiledPattern, compile_patterns
from scrubber.core.rewriter import RewriteResult, compute_replacement, rewrite_literal

__all__ = [
    "ScrubConfig",
    "ScrubEngine",
    "CompiledPattern",
    "MatchSpan",
    "RewriteResult",
    "ScrubError",
    "InvalidPatternSyntax",
    "ConfigurationError",
    "compile_patterns",
    "scan",
    "resolve",
    "compute_replacement",
    "rewrite_literal",
    "parse_config_json",
    "load_config",
    "save_config",
]
