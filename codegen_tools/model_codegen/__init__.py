"""Model Code Generator - Generates Sequelize TypeScript models from schema documents."""

from .code_file import ArtifactState, CodeFile, GenerationSummary, materialize
from .main import (
    Column,
    ModelSpec,
    GeneratorContext,
    generate,
    main,
    DEFAULT_TS_TYPES,
)
from .naming_policy import NamingPolicy
from .template_vars import (
    InitTemplateVars,
    ModelTemplateVars,
    init_template_vars,
    model_template_vars,
)

__all__ = [
    "ArtifactState",
    "CodeFile",
    "GenerationSummary",
    "materialize",
    "Column",
    "ModelSpec",
    "GeneratorContext",
    "generate",
    "main",
    "DEFAULT_TS_TYPES",
    "NamingPolicy",
    "InitTemplateVars",
    "ModelTemplateVars",
    "init_template_vars",
    "model_template_vars",
]
