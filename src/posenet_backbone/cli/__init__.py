'''Command line entry points.'''
