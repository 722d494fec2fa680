"""
Core configuration, dependency container and error taxonomy.
"""
