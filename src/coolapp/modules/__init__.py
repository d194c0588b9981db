"""CoolApp Modules - All application modules."""
