"""
Aquarium Package
================

A small real-time aquarium: a fish wanders and lunges, bubbles rise, the fish
chases the nearest bubble and pops it on contact.

- core: the per-tick simulation plus a thin pygame renderer
- aquarium_config.yaml: every tunable, grouped into named profiles
"""
