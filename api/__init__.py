"""API package - routers, dependencies and middleware"""
