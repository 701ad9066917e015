# src/tcpl_scanner/modules/indexing/__init__.py
"""
Módulo de Indexación de código PHP.
"""

from __future__ import annotations

# Application
from .application.use_cases import (
    CodebaseIndex,
    IndexCodebase,
    build_dependency_index,
    filter_files,
    sort_files,
)

# Domain
from .domain.exceptions import ParseError, ScannerError, SourceReadError, TokenizeError
from .domain.models import Class, ClassDependencyIndex, Function, SourceFile, Stmt
from .domain.parser import Parser
from .domain.tokenizer import Tokenizer, token_profile, tokenize
from .domain.value_objects import SortType, StmtType, Visibility

# Infrastructure
from .infrastructure.adapters import JsonReportExporter, LocalSourceReader

__all__ = [
    "Class",
    "ClassDependencyIndex",
    "Function",
    "SourceFile",
    "Stmt",
    "SortType",
    "StmtType",
    "Visibility",
    "Parser",
    "Tokenizer",
    "tokenize",
    "token_profile",
    "ScannerError",
    "SourceReadError",
    "TokenizeError",
    "ParseError",
    "CodebaseIndex",
    "IndexCodebase",
    "build_dependency_index",
    "filter_files",
    "sort_files",
    "JsonReportExporter",
    "LocalSourceReader",
]
