"""
Core lazy sequences, domain models, scalar math and contracts.

This package contains the data layer of the limit engine; it knows nothing
about trimming or limit resolution.
"""
