"""
The CONTROLLER layer translates window-manager events into effect lifecycles.
"""
