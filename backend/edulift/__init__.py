"""
EduLift database bootstrap - users collection schema validation and indexes.
"""
