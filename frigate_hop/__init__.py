"""
Frigate Hop
===========

Arcade simulation of a frigate crossing rows of drifting icebergs and sea
mines. Reaching the goal band at the top advances to a denser, faster level;
touching a hazard ends the run.

The game is split into a framework-neutral simulation (frigate_hop.core) and
host-side collaborators: renderers, a Gymnasium environment, the high score
table and the interactive player in tools/.

All tunable parameters are in game_config.yaml.
"""
