"""Record store access: entities, models, configuration and repositories"""
