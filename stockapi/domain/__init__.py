"""Pure domain helpers: identifiers, filters, schemas and validation."""
