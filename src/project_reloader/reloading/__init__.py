"""
Reloading subsystem.

Components:
- loaders.py: refresh tasks (one project state slice each) + the status reporter
- worker_pool.py: fixed-size daemon thread pool with bounded drain
- scheduler.py: fixed-rate scheduler with CREATED/RUNNING/STOPPED lifecycle
- factory.py: picks the refresh tasks for a project type and builds the scheduler
"""
