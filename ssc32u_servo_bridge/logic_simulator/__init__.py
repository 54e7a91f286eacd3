"""
Logic Simulator

Runs the servo controller without ROS: an in-process message bus, a mirror of
the node's topic wiring, and an emulated SSC-32U board that remembers the
last pulse width per channel.
"""
