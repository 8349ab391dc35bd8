"""
Tenants of the licensing service and the products they sell.

Brand and Product entities live in ``brands.domain``, their storage
contracts in ``brands.ports`` and the ORM adapters in
``brands.infrastructure``. The products table itself is registered by
the ``products`` app.
"""
