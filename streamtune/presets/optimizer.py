"""
Stream optimization to reduce stuttering.

This module turns the base stream settings into capped StreamOptions for
each video source, provides an emergency low-quality fallback, and builds
the aggressive low-latency FFmpeg argument lists used for live streaming.
"""

from dataclasses import replace
from typing import List, Optional, Union

from ..config.models import PerformanceConfig, StreamSettings
from ..models import QualityTier, StreamOptions, VideoSource
from ..utils import InvalidDurationError, format_kbps, format_number, get_logger
from .performance import detect_video_source, get_quality_preset

logger = get_logger(__name__)

# Caps applied on top of the configured stream settings
OPTIMIZED_MAX_FRAME_RATE = 24
OPTIMIZED_MAX_BITRATE = 1200
OPTIMIZED_MAX_BITRATE_PEAK = 1800

# (frame rate cap, bitrate cap) per source
SOURCE_LIMITS = {
    VideoSource.YOUTUBE: (20, 800),
    VideoSource.TWITCH: (24, 1000),
    VideoSource.LOCAL: (24, 1200),
}

EMERGENCY_WIDTH = 854
EMERGENCY_HEIGHT = 480
EMERGENCY_FRAME_RATE = 15
EMERGENCY_BITRATE = 500
EMERGENCY_BITRATE_PEAK = 800
EMERGENCY_AUDIO_BITRATE = 64


def get_optimized_stream_options(settings: Optional[StreamSettings] = None) -> StreamOptions:
    """
    Get stream options tuned to reduce stuttering.

    Frame rate and bitrates from the settings are capped; everything else is
    fixed for low latency.

    Args:
        settings: Base stream settings (built-in defaults if None)

    Returns:
        Optimized StreamOptions
    """
    settings = settings or StreamSettings()
    return StreamOptions(
        width=settings.width,
        height=settings.height,
        frame_rate=min(settings.fps, OPTIMIZED_MAX_FRAME_RATE),
        bitrate_video=min(settings.bitrate_kbps, OPTIMIZED_MAX_BITRATE),
        bitrate_video_max=min(settings.max_bitrate_kbps, OPTIMIZED_MAX_BITRATE_PEAK),
        video_codec=settings.video_codec,
        hardware_accelerated_decoding=settings.hardware_accelerated_decoding,
        minimize_latency=True,
        h26x_preset="ultrafast",
        audio_bitrate=96,
        audio_channels=2,
        audio_sample_rate=48000,
        keyframe_interval=1,
        buffer_size=8192,
        max_muxing_queue_size=2048,
    )


def get_stream_options_for_video(
    source: str, settings: Optional[StreamSettings] = None
) -> StreamOptions:
    """
    Get optimized stream options for a specific video.

    YouTube gets the most conservative caps since its streams often have
    variable frame rates; local files get the most headroom.

    Args:
        source: Video URL or local file path
        settings: Base stream settings (built-in defaults if None)

    Returns:
        StreamOptions capped for the detected source
    """
    base_options = get_optimized_stream_options(settings)
    video_source = detect_video_source(source)
    frame_rate, bitrate = SOURCE_LIMITS[video_source]

    logger.debug(f"Applying {video_source.value} limits: {frame_rate} fps, {bitrate} kbps")
    return base_options.with_limits(frame_rate=frame_rate, bitrate_video=bitrate)


def get_emergency_stream_options(settings: Optional[StreamSettings] = None) -> StreamOptions:
    """
    Get ultra-low settings for severe stuttering.

    Only the codec and hardware decoding flag are taken from the settings.
    """
    settings = settings or StreamSettings()
    return StreamOptions(
        width=EMERGENCY_WIDTH,
        height=EMERGENCY_HEIGHT,
        frame_rate=EMERGENCY_FRAME_RATE,
        bitrate_video=EMERGENCY_BITRATE,
        bitrate_video_max=EMERGENCY_BITRATE_PEAK,
        video_codec=settings.video_codec,
        hardware_accelerated_decoding=settings.hardware_accelerated_decoding,
        minimize_latency=True,
        h26x_preset="ultrafast",
        audio_bitrate=EMERGENCY_AUDIO_BITRATE,
        audio_channels=1,
        audio_sample_rate=48000,
        keyframe_interval=1,
        buffer_size=16384,
        max_muxing_queue_size=4096,
    )


def resolve_stream_options(
    source: str,
    quality: Optional[Union[QualityTier, str]] = None,
    emergency: bool = False,
    settings: Optional[StreamSettings] = None,
    performance: Optional[PerformanceConfig] = None,
) -> StreamOptions:
    """
    Resolve the stream options for a video in one call.

    The emergency fallback wins over everything else. Otherwise the
    per-source options are used and, when a quality tier is given, further
    capped by that tier's frame rate and bitrate.

    Args:
        source: Video URL or local file path
        quality: Optional quality tier to apply
        emergency: Use the emergency low-quality fallback
        settings: Base stream settings (built-in defaults if None)
        performance: Performance tables (built-in defaults if None)

    Returns:
        Resolved StreamOptions

    Raises:
        PresetNotFoundError: If the quality tier is not defined
    """
    if emergency:
        logger.info("Using emergency stream options")
        return get_emergency_stream_options(settings)

    options = get_stream_options_for_video(source, settings)
    if quality is None:
        return options

    preset = get_quality_preset(quality, performance)
    return replace(
        options,
        frame_rate=min(options.frame_rate, preset.frame_rate),
        bitrate_video=min(options.bitrate_video, preset.bitrate_video),
        minimize_latency=preset.minimize_latency,
    )


def get_optimized_ffmpeg_input(source: str, seek_time: float = 0) -> List[str]:
    """
    Get optimized FFmpeg input options for a video source.

    Args:
        source: Video URL or local file path
        seek_time: Start offset in seconds (input seek, omitted when 0)

    Returns:
        List of FFmpeg arguments ending with -i <source>

    Raises:
        InvalidDurationError: If seek_time is negative
    """
    if seek_time < 0:
        raise InvalidDurationError(f"Seek time cannot be negative: {seek_time}", value=seek_time)

    args = [
        "-re",
        "-stream_loop",
        "-1",
        "-analyzeduration",
        "20M",
        "-probesize",
        "20M",
        "-fflags",
        "+genpts+discardcorrupt",
        "-avoid_negative_ts",
        "make_zero",
        "-max_delay",
        "100000",
        "-thread_queue_size",
        "512",
    ]

    # -ss before -i seeks the input rather than decoding and discarding
    if seek_time > 0:
        args.extend(["-ss", format_number(seek_time)])

    args.extend(["-i", source])
    return args


def get_optimized_ffmpeg_output() -> List[str]:
    """Get optimized FFmpeg output options for ultra-low latency MPEG-TS."""
    return [
        # Video
        "-c:v",
        "libx264",
        "-preset",
        "ultrafast",
        "-tune",
        "zerolatency",
        "-profile:v",
        "baseline",
        "-level",
        "3.0",
        "-x264-params",
        "keyint=30:min-keyint=30:scenecut=0:bframes=0:ref=1",
        "-g",
        "30",
        "-bf",
        "0",
        "-refs",
        "1",
        "-crf",
        "28",
        "-maxrate",
        format_kbps(OPTIMIZED_MAX_BITRATE),
        "-bufsize",
        format_kbps(OPTIMIZED_MAX_BITRATE * 2),
        # Audio
        "-c:a",
        "aac",
        "-b:a",
        "96k",
        "-ar",
        "48000",
        "-ac",
        "2",
        # Output
        "-f",
        "mpegts",
        "-muxdelay",
        "0.05",
        "-muxpreload",
        "0.05",
        "-flush_packets",
        "1",
        "-fflags",
        "+genpts",
        "-avoid_negative_ts",
        "make_zero",
        "-max_muxing_queue_size",
        "2048",
        "-threads",
        "2",
    ]


def get_performance_filters() -> str:
    """
    Get the FFmpeg filter chain used for fast scaling and audio resampling.

    Returns:
        Comma-joined filter string
    """
    return ",".join(
        [
            "scale=1280:720:flags=fast_bilinear",
            "fps=fps=24",
            "format=yuv420p",
            "aresample=48000:async=1000",
            "aformat=sample_fmts=fltp:sample_rates=48000:channel_layouts=stereo",
        ]
    )


def _set_option(args: List[str], flag: str, value: str) -> None:
    """Replace the value following flag, appending the pair if absent."""
    if flag in args:
        args[args.index(flag) + 1] = value
    else:
        args.extend([flag, value])


def build_ffmpeg_command(
    source: str,
    seek_time: float = 0,
    emergency: bool = False,
    output: str = "-",
) -> List[str]:
    """
    Build a complete FFmpeg command for streaming a video.

    Args:
        source: Video URL or local file path
        seek_time: Start offset in seconds
        emergency: Apply the emergency low-quality overrides
        output: Output target (stdout by default)

    Returns:
        FFmpeg command as list of arguments
    """
    command = ["ffmpeg"]
    command.extend(get_optimized_ffmpeg_input(source, seek_time))

    output_args = get_optimized_ffmpeg_output()
    if emergency:
        options = get_emergency_stream_options()
        _set_option(output_args, "-maxrate", format_kbps(options.bitrate_video_max))
        _set_option(output_args, "-bufsize", format_kbps(options.bitrate_video_max * 2))
        _set_option(output_args, "-b:a", format_kbps(options.audio_bitrate))
        _set_option(output_args, "-ac", str(options.audio_channels))
        _set_option(
            output_args,
            "-vf",
            f"scale={options.width}:{options.height},fps={options.frame_rate}",
        )
    command.extend(output_args)

    command.append(output)

    logger.debug(f"Built command: {' '.join(command)}")
    return command
