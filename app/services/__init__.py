"""Business operations shared by the API routes"""
