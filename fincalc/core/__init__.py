"""Pure calculation core: rates, closed-form compounding, projections, calculators."""
