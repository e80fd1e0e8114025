"""Pipeline steps, one sub-package per stage."""
