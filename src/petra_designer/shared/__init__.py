"""
Shared module containing cross-cutting concerns.

Structure:
    shared/
        application/
            validation/     - Validation framework (ValidationResult, validators)
        domain/
            value_objects/  - PortType
"""
