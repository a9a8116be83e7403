"""
TrackSlot Configuration
"""
from pathlib import Path

# Placement settings (milliseconds)
MIN_ITEM_DURATION_MS = 100  # Shrink floor when an item is squeezed into a gap
SNAP_DISTANCE_MS = 200  # Drag and resize-edge snapping
SNAP_PROXIMITY_MS = 500  # Insert-at-playhead attaches to items this close

# Timeline settings
DEFAULT_TOTAL_DURATION_MS = 60000  # 60 seconds
SKIP_STEP_MS = 5000

# Placeholder defaults per media type
DEFAULT_ITEM_DURATIONS_MS = {
    'video': 3000,
    'audio': 3000,
    'image': 5000,
}
DEFAULT_MAX_DURATIONS_MS = {
    'video': 10000,
    'audio': 15000,
    'image': None,  # Images can be stretched freely
}

# Zoom settings (pixels per second)
DEFAULT_ZOOM = 50
MIN_ZOOM = 10
MAX_ZOOM = 200
ZOOM_STEP = 20

# Ruler settings
MIN_MARKER_SPACING_PX = 60  # Enough room for a "0:00.000" label
MARKER_INTERVALS_MS = [100, 250, 500, 1000, 2000, 5000, 10000, 30000, 60000]

# Canvas geometry
TRACK_HEADER_WIDTH = 150
RULER_HEIGHT = 25
TRACK_HEIGHT = 50
TRACK_PADDING = 5
EDGE_THRESHOLD_PX = 8  # Pixels from an item edge that start a resize

# Logging
LOG_LEVEL = "INFO"

# Paths
PROJECT_ROOT = Path(__file__).parent.parent
