'''Packaged hydra configs.'''
