"""Generate typed Strapi clients, schemas and actions from a live Strapi schema."""

__version__ = "0.1.0"
