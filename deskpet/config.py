"""Device-wide tuning constants."""

# Display
DISPLAY_WIDTH = 320
DISPLAY_HEIGHT = 240

# Face UI
FACE_CENTER_X = DISPLAY_WIDTH // 2
FACE_CENTER_Y = DISPLAY_HEIGHT // 2

EYE_WIDTH = 40
EYE_HEIGHT = 48
EYE_SPACING = 60
PUPIL_RADIUS = 8
EYE_Y_OFFSET = -20

GAZE_MAX_OFFSET = 12
GAZE_SMOOTH_ALPHA = 0.2

BROW_WIDTH = 36
BROW_HEIGHT = 6
BROW_Y_OFFSET = -38

MOUTH_WIDTH = 30
MOUTH_HEIGHT = 10
MOUTH_Y_OFFSET = 30

BLINK_INTERVAL_MIN = 2000
BLINK_INTERVAL_MAX = 5000
BLINK_DURATION = 150

SPEAK_ANIM_INTERVAL = 180
MOUTH_OPEN_MAX = 18
MOUTH_OPEN_MIN = 4

# Touch / gesture
TAP_THRESHOLD_MS = 200
LONG_PRESS_THRESHOLD_MS = 800
DOUBLE_TAP_WINDOW_MS = 300
SWIPE_THRESHOLD_PX = 60
RELAXED_SWIPE_THRESHOLD_PX = 42
MOVE_THRESHOLD_PX = 20
GESTURE_DEBUG_LOG = False

TOUCH_SAMPLING_HZ = 50

# Camera
CAMERA_FRAME_WIDTH = 320
CAMERA_FRAME_HEIGHT = 240
CAMERA_FPS = 20
CAMERA_INIT_ON_BOOT = False
CAMERA_JPEG_QUALITY = 85

# Face detection
DETECTION_FRAME_WIDTH = CAMERA_FRAME_WIDTH
DETECTION_FRAME_HEIGHT = CAMERA_FRAME_HEIGHT
DETECTION_FPS = 5
FACE_DETECTION_ENABLED_ON_BOOT = True
FACE_TRACKING_TIMEOUT_MS = 3000
SICK_EMOTION_DURATION_MS = 2000
FACE_VISION_BOOT_BURST_MS = 6000
FACE_VISION_TOUCH_BURST_MS = 8000
FACE_VISION_IDLE_RESCAN_INTERVAL_MS = 45000
FACE_VISION_IDLE_RESCAN_BURST_MS = 2500

# Wi-Fi
WIFI_RECONNECT_INTERVAL_MS = 5000

# SD card
SD_SPI_SCK_PIN = 36
SD_SPI_MISO_PIN = 35
SD_SPI_MOSI_PIN = 37
SD_SPI_CS_PIN = 4
SD_SPI_FREQ = 25_000_000
PHOTO_DIR = "/photos"
MUSIC_DIR = "/music"

# Pomodoro
POMODORO_FOCUS_MINUTES = 25
POMODORO_BREAK_MINUTES = 5
POMODORO_RING_MS = 3000

# Power
POWER_TASK_INTERVAL_MS = 1000
BATTERY_FULL_VOLTAGE = 4.2
BATTERY_EMPTY_VOLTAGE = 3.3
BATTERY_LOW_THRESHOLD = 3.5
BATTERY_CRITICAL_VOLTAGE = 3.2
BATTERY_CRITICAL_DURATION_MS = 30000
BATTERY_LOW_REMIND_INTERVAL_MS = 60000
BROWNOUT_SAFE_MODE_MS = 60000

# AI
XIAOZHI_REAL_ACTIVATION = True
XIAOZHI_APP_NAME = "xiaozhi"
XIAOZHI_FIRMWARE_VERSION = "2.2.6"
XIAOZHI_BOARD_TYPE = "m5stack-core-s3"
XIAOZHI_CHIP_ID = "esp32s3"
AI_AUDIO_SAMPLE_RATE = 16000

# Servo / PCA9685
PCA9685_I2C_ADDR = 0x40
PCA9685_I2C_FREQ_HZ = 100_000
SERVO_PWM_FREQ_HZ = 50
SERVO_PAN_CHANNEL = 0
SERVO_TILT_CHANNEL = 1
SERVO_MIN_PULSE_US = 600
SERVO_MAX_PULSE_US = 2400
SERVO_PAN_CENTER_DEG = 90
SERVO_TILT_CENTER_DEG = 140
SERVO_CENTER_DEG = SERVO_PAN_CENTER_DEG
SERVO_SAFE_MIN_DEG = 10
SERVO_SAFE_MAX_DEG = 170
SERVO_PAN_INVERT = False
SERVO_TILT_INVERT = False
SERVO_FACE_MOTION_SPEED_DPS = 28.0
SERVO_SAFE_CENTER_SPEED_DPS = 22.0
SERVO_TRACKING_MOTION_SPEED_DPS = 28.0
SERVO_MOTION_UPDATE_MS = 40
SERVO_MOTION_BEGIN_RETRY_MS = 3000
SERVO_FACE_PAN_OFFSET_DEG = 24.0
SERVO_FACE_TILT_OFFSET_DEG = 18.0
SERVO_FACE_SMALL_TILT_DEG = 12.0
SERVO_DANCE_MOTION_SPEED_DPS = 36.0
SERVO_DANCE_PAN_OFFSET_DEG = 20.0
SERVO_DANCE_TILT_UP_DEG = 8.0
SERVO_DANCE_TILT_DOWN_DEG = 10.0
SERVO_FACE_TRACK_GAIN_DEG = 7.0
SERVO_FACE_TRACK_DEADBAND = 0.08
SERVO_FACE_TRACK_FILTER_ALPHA = 0.35
SERVO_PHOTO_TRACK_SETTLE_MS = 2000

# Music
MUSIC_SPEAKER_VOLUME = 64
DANCE_MUSIC_START_DELAY_MS = 900
BOOT_CHIME_ENABLED = False

# Affinity
AFFINITY_DEFAULT_VALUE = 35
AFFINITY_MIN_VALUE = 0
AFFINITY_MAX_VALUE = 100

# Tasks
SERIAL_DIAGNOSTIC_HEARTBEAT = False
SERIAL_HEARTBEAT_INTERVAL_MS = 5000

UI_TASK_PRIORITY = 2
TOUCH_TASK_PRIORITY = 3
CAMERA_TASK_PRIORITY = 2
VISION_TASK_PRIORITY = 1
AI_TASK_PRIORITY = 2
POWER_TASK_PRIORITY = 1
NETWORK_TASK_PRIORITY = 1

UI_TASK_STACK_SIZE = 8192
TOUCH_TASK_STACK_SIZE = 4096
CAMERA_TASK_STACK_SIZE = 16384
VISION_TASK_STACK_SIZE = 8192
AI_TASK_STACK_SIZE = 16384
POWER_TASK_STACK_SIZE = 4096
NETWORK_TASK_STACK_SIZE = 4096