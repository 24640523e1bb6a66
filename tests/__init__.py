"""
Test suite for the Light Cycle arena simulation.

This package contains unit tests organized by component:
- test_directions.py: Direction, bindings and vector helpers
- test_physics.py: Boost energy, integration and trail sampling
- test_collisions.py: Wall, trail and hazard checks
- test_cycle.py: LightCycle.update and handle_input
- test_ai.py: Autopilot decisions per tier
- test_modes.py: Mode state machine
- test_game_state.py: Round lifecycle, tick order and end-to-end scenarios
- test_effects.py: Explosions, sparks and screen shake
- test_settings_loader.py: Settings JSON loading
- test_camera.py: Arena-to-screen transforms
"""
