"""Domain layer for khata application.

Services are imported from their modules (``khata.domain.job`` and so on);
this package stays import-light because the database layer imports the
entity modules.
"""
