"""Interactive demo of the consistency of OLS estimates as n grows."""
