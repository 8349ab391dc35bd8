"""
Products module - persistence for brand products.

The Product entity and its repository port live in the brands module;
this app owns the ORM model and its table.
"""
