"""
Modules package initialization.
This package contains the functional modules of TheCueRoom backend.
"""

from cueroom.modules import auth
from cueroom.modules import user_management
from cueroom.modules import posts
from cueroom.modules import bot
from cueroom.modules import realtime
