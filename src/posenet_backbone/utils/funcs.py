'''
General utility functions used throughout this project.
'''

# standard imports
import datetime

# -------------------------------Public Function-------------------------------
def get_timestamp(t_format: str='%Y%m%d_%H%M%S') -> str:
    '''
    Get current time as a string specified by `t_format`.

    Args:
        t_format (str, optional): Sets time string format
            (default: 20001234_567).
    '''

    # return formatted time string
    return datetime.datetime.now().strftime(t_format)
