from .playback import PlaybackScheduler, PlaybackState
from .session import RideSession
