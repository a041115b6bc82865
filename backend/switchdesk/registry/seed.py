"""Static seed data loaded at process start."""

from __future__ import annotations

from switchdesk.models import Device, Scene, SceneSource, Source, SourceSettings

# Devices reported by the simulated detection pass
SIMULATED_DEVICES: tuple[Device, ...] = (
    Device(
        id="device_blackmagic_1",
        type="blackmagic",
        name="Blackmagic DeckLink SDI",
        model="DeckLink SDI 4K",
        status="connected",
        inputs=["SDI 1", "SDI 2"],
        outputs=["SDI Out 1", "SDI Out 2"],
        formats=["1080p50", "1080p60", "4Kp30"],
        serial="BMD-12345",
    ),
    Device(
        id="device_ndi_1",
        type="ndi",
        name="NDI Source",
        status="available",
        address="192.168.1.100",
        resolution="1920x1080",
        fps=30,
        audio=True,
    ),
    Device(
        id="device_usb_1",
        type="usb",
        name="USB Webcam",
        status="connected",
        resolution="1280x720",
        fps=30,
        audio=True,
        vendor="Logitech",
    ),
)


def initial_scenes() -> list[Scene]:
    return [
        Scene(
            id="scene_default_1",
            name="Main Studio",
            description="Main studio scene",
            layout="fullscreen",
            sources=[
                SceneSource(id="source_cam_1", type="video", x=0, y=0, width=1920, height=1080),
                SceneSource(id="source_mic_1", type="audio", volume=0.8, muted=False),
            ],
            transitions=["cut", "fade"],
        ),
        Scene(
            id="scene_default_2",
            name="Dual Camera",
            description="Two cameras side by side",
            layout="split_horizontal",
            sources=[
                SceneSource(id="source_cam_1", type="video", x=0, y=0, width=960, height=1080),
                SceneSource(id="source_cam_2", type="video", x=960, y=0, width=960, height=1080),
                SceneSource(id="source_mic_1", type="audio", volume=0.8, muted=False),
            ],
            transitions=["cut", "slide"],
        ),
    ]


def initial_sources() -> list[Source]:
    studio_video = dict(resolution="1920x1080", fps=50, codec="raw", color_space="bt709")
    return [
        Source(
            id="source_cam_1",
            name="Studio Camera A",
            type="video",
            device_id="device_blackmagic_1",
            device_port="SDI 1",
            settings=SourceSettings(**studio_video),
        ),
        Source(
            id="source_cam_2",
            name="Studio Camera B",
            type="video",
            device_id="device_blackmagic_1",
            device_port="SDI 2",
            settings=SourceSettings(**studio_video),
        ),
        Source(
            id="source_mic_1",
            name="Main Microphone",
            type="audio",
            device_id="system_default",
            settings=SourceSettings(sample_rate=48000, channels=2, bitrate=192000),
        ),
    ]
