"""
Notifications app

Purpose: Keep users engaged with their skill list.
Runs the periodic scheduler that sends weekly skill summaries and
inactivity reminders by email.
"""
