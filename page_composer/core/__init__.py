"""Core module pour page_composer (couleurs, schéma des champs, snapshot de page)."""
