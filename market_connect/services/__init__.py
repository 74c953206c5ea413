"""Services package - domain evaluators and owner/customer services."""
