"""Core calculation modules for PhysCalc.

This package contains the engineering calculations:
- formulas: Fluid formula catalog (Reynolds, Bernoulli, continuity, hydrostatic)
- beam: Closed-form beam statics
- facade: Parse/convert/dispatch/format orchestration
- history: In-memory calculation history
- config: Presentation settings (JSON)
"""
