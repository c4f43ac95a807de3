"""Visualization state engines for PhysCalc.

- engine: Particle simulation for the fluid formulas
- beam_curve: Exaggerated elastic curve for the beam solver
- loop: Cancelable per-frame animation driver
- render: Matplotlib drawing of frames and beam diagrams
"""
