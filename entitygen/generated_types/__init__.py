"""Namespace of wrapper types synthesized at runtime by ``entitygen.types.runtime``."""
