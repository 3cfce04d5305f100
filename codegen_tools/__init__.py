"""Schema-driven code generators: Sequelize models and DBML diagrams."""

__version__ = "0.1.0"
