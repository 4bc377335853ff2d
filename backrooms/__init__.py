"""
Backrooms Grid Raycaster

First-person rendering of a 2D occupancy grid.

Modules:
    raycast/    - Directions, worlds, and the grid raycasting engine
    visualize/  - Column projection and the pygame depth viewer
    config      - Viewer/camera configuration presets
    run         - Command line entry point
"""
