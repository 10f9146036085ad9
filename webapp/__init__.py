"""
EcoTrip planner web application.
"""
