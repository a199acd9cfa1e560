"""
Gymnarium Application
=====================
Run a simulation environment with an agent, a visualiser and an exit
condition, after checking that the four choices fit together.

Package layout
--------------
gymnarium_app/
    availables/       – variant registry and per-variant configuration
    compatibility/    – pairwise compatibility tables and combination validator
    session/          – session builder and the assembled session
    environments/     – Gym MountainCar, Code Bullet AI Learns to DRIVE
    agents/           – random agent, keyboard input agent
    visualisers/      – no visualiser, 2D window visualiser
    exit_conditions/  – episodes simulated, visualiser closed
    runner.py         – run loop, run options and results
    persistence.py    – JSON state files
    cli.py            – command line interface
"""

__version__ = "0.1.0"
