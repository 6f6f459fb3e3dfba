"""Interactive line-based shell for Festplan."""
