from .neighbor_validator import validate_neighbor_list
from .source_validator import validate_charges, validate_dipoles

__all__ = ["validate_charges", "validate_dipoles", "validate_neighbor_list"]
