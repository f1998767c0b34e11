# --- Configuration Constants ---
DEFAULT_FPS = 30
DEFAULT_RESOLUTION = (1920, 1080)

# Spectrum settings
SPECTRUM_BINS = 256  # Magnitude samples per frame
N_FFT = SPECTRUM_BINS * 2
MAX_MAGNITUDE = 255.0  # Byte scale, like a browser analyser node
MIN_SPECTRUM_BINS = 16  # Anything shorter is treated as a bad frame
MIN_DB = -80  # Noise floor mapped to magnitude 0

# Band split (fractions of the spectrum length)
BASS_SPLIT = 0.1  # bass = first 10%
MID_SPLIT = 0.6  # mid = next 50%, treble = remaining 40%

# Tempo estimation
DEFAULT_BPM = 120
MIN_BPM = 60
MAX_BPM = 200
PEAK_THRESHOLD = 180 / MAX_MAGNITUDE  # Normalised bass level
REFRACTORY_MS = 200
MAX_PEAKS = 10
MAX_INTERVALS = 8
MIN_INTERVALS = 4

# Particle spawning
BASS_SPAWN_WEIGHT = 8
MID_SPAWN_WEIGHT = 5
TREBLE_SPAWN_WEIGHT = 3
REFERENCE_BPM = 120
BPM_DAMPING = 0.6  # Keeps fast tracks from getting chaotic
BASE_SPEED = 2.0  # pixels per tick
EXPLOSION_STRENGTH = 6.0  # pixels per tick at full bass
EXPLOSION_EXPONENT = 0.5
BASE_SIZE = 2.0  # pixels
VOLUME_SIZE = 8.0  # extra pixels at full volume
ROTATION_SPEED = 0.1  # radians per tick
SCALE_PULSE = 0.05  # initial scale velocity at full bass
BASE_LIFETIME = 90  # ticks
LIFETIME_JITTER = 60  # ticks

# Colour cascade (hue in degrees, thresholds on normalised levels)
BASS_HUE_THRESHOLD = 0.6
MID_HUE_THRESHOLD = 0.5
TREBLE_HUE_THRESHOLD = 0.4
BASS_HUE = 0
MID_HUE = 120
TREBLE_HUE = 240
HUE_JITTER = 30

# Particle physics
MAX_PARTICLES = 250
VELOCITY_DECAY = 0.98
GRAVITY = 0.05  # pixels per tick^2
SCALE_DECREMENT = 0.005
MIN_SCALE = 0.1
HUE_DRIFT = 0.5  # degrees per tick
WRAP_MARGIN = 20  # pixels outside the viewport before wrapping

# Trail/ghost effect settings
TRAIL_LENGTH = 5  # Number of previous frames to keep
TRAIL_ALPHA_DECAY = 0.7  # How quickly trails fade
