"""Generate TypeScript resolver type declarations from Prisma DMMF schemas."""

__version__ = "0.1.0"
