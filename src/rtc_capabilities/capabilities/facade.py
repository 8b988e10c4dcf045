"""Browser capabilities for gating WebRTC code paths.

A ``BrowserCapabilities`` object is built once per session. It resolves the
capability dataset against the platform identity at construction and then
answers boolean queries that combine the resolved flags with product
family and version checks.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from rtc_capabilities.config import get_settings
from rtc_capabilities.platform.identity import PlatformIdentity, probe_identity

from .dataset import get_dataset
from .models import CapabilityDataset
from .resolver import IS_SUPPORTED, resolve

logger = logging.getLogger(__name__)

PlatformInfo = Union[PlatformIdentity, Mapping[str, Any]]


class BrowserCapabilities:
    """Capabilities of the current browser for a real-time session.

    The identity is held by composition; family and version predicates are
    delegated to it. All queries are side-effect free and never raise.

    Args:
        in_iframe: True if the application is loaded in an iframe.
        platform_info: Identity of the browser, either a PlatformIdentity or
            a ``{"name": ..., "version": ...}`` mapping. Probed from the
            configured User-Agent when omitted.
        dataset: Capability dataset. Defaults to the process-wide dataset.
    """

    def __init__(
        self,
        in_iframe: bool = False,
        platform_info: Optional[PlatformInfo] = None,
        dataset: Optional[CapabilityDataset] = None,
    ) -> None:
        if platform_info is None:
            identity = probe_identity()
        elif isinstance(platform_info, PlatformIdentity):
            identity = platform_info
        else:
            identity = PlatformIdentity.from_dict(platform_info)

        if dataset is None:
            dataset = get_dataset()

        self._identity = identity
        self._in_iframe = bool(in_iframe)
        self._capabilities = resolve(
            identity, dataset.records_for(identity.name), self._in_iframe
        )

        logger.debug(
            "Browser capabilities resolved: %s %s supported=%s",
            identity.name,
            identity.version,
            self._capabilities[IS_SUPPORTED],
            extra={
                "product": identity.name,
                "product_version": identity.version,
                "in_iframe": self._in_iframe,
            },
        )

    @classmethod
    def from_environment(
        cls, dataset: Optional[CapabilityDataset] = None
    ) -> BrowserCapabilities:
        """Build capabilities for the configured runtime.

        Uses the ``platform_user_agent`` and ``in_iframe`` settings.
        """
        settings = get_settings()
        return cls(
            in_iframe=settings.in_iframe,
            platform_info=probe_identity(settings.platform_user_agent),
            dataset=dataset,
        )

    # ------------------------------------------------------------------
    # Identity delegation
    # ------------------------------------------------------------------

    @property
    def identity(self) -> PlatformIdentity:
        return self._identity

    @property
    def name(self) -> str:
        return self._identity.name

    @property
    def version(self) -> str:
        return self._identity.version

    @property
    def in_iframe(self) -> bool:
        return self._in_iframe

    @property
    def capabilities(self) -> Mapping[str, Any]:
        """Resolved capability flags (read-only)."""
        return self._capabilities

    def is_chrome(self) -> bool:
        return self._identity.is_chrome()

    def is_electron(self) -> bool:
        return self._identity.is_electron()

    def is_edge(self) -> bool:
        return self._identity.is_edge()

    def is_firefox(self) -> bool:
        return self._identity.is_firefox()

    def is_iexplorer(self) -> bool:
        return self._identity.is_iexplorer()

    def is_nwjs(self) -> bool:
        return self._identity.is_nwjs()

    def is_opera(self) -> bool:
        return self._identity.is_opera()

    def is_react_native(self) -> bool:
        return self._identity.is_react_native()

    def is_safari(self) -> bool:
        return self._identity.is_safari()

    def is_version_greater_than(self, version: str) -> bool:
        return self._identity.is_version_greater_than(version)

    def is_version_less_than(self, version: str) -> bool:
        return self._identity.is_version_less_than(version)

    def is_version_equal_to(self, version: str) -> bool:
        return self._identity.is_version_equal_to(version)

    # ------------------------------------------------------------------
    # Dataset-backed queries
    # ------------------------------------------------------------------

    def _flag(self, name: str) -> bool:
        return bool(self._capabilities.get(name, False))

    def is_supported(self) -> bool:
        """Check whether the browser is supported at all."""
        return bool(self._capabilities[IS_SUPPORTED])

    def supports_audio_in(self) -> bool:
        """Check whether the browser supports incoming audio."""
        return self._flag("audioIn")

    def supports_audio_out(self) -> bool:
        """Check whether the browser supports outgoing audio."""
        return self._flag("audioOut")

    def supports_video_in(self) -> bool:
        """Check whether the browser supports incoming video."""
        return self._flag("videoIn")

    def supports_video_out(self) -> bool:
        """Check whether the browser supports outgoing video."""
        return self._flag("videoOut")

    def supports_screen_sharing(self) -> bool:
        """Check whether the browser supports screen sharing."""
        return self._flag("screenSharing")

    # ------------------------------------------------------------------
    # Identity-backed queries
    # ------------------------------------------------------------------

    def is_safari_with_webrtc(self) -> bool:
        """Check if the browser is a Safari version with native WebRTC."""
        return self.is_safari() and not self.is_version_less_than("11")

    def is_temasys_plugin_used(self) -> bool:
        """Check if media requires the Temasys WebRTC plugin.

        True for Safari without native WebRTC and for Internet Explorer
        before 12. The plugin never supported Edge.
        """
        return (self.is_safari() and not self.is_safari_with_webrtc()) or (
            self.is_iexplorer() and self.is_version_less_than("12")
        )

    def does_video_mute_by_stream_remove(self) -> bool:
        """Check if video mute removes and disposes the MediaStream.

        Removing the stream from the PeerConnection on mute turns off the
        camera device.
        """
        return not (
            self.is_firefox() or self.is_edge() or self.is_safari_with_webrtc()
        )

    def supports_p2p(self) -> bool:
        """Check whether peer to peer connections are supported."""
        return not self.is_edge()

    def supports_video(self) -> bool:
        """Check whether the browser can capture and display video.

        Safari with native WebRTC only handles H264 while the bridge sends VP8.
        """
        return not self.is_safari_with_webrtc()

    def supports_simulcast(self) -> bool:
        """Check whether simulcast is supported on the current browser."""
        return (
            self.is_chrome()
            or self.is_firefox()
            or self.is_electron()
            or self.is_nwjs()
            or self.is_react_native()
        )

    def uses_unified_plan(self) -> bool:
        """Check if the browser negotiates with Unified Plan SDP."""
        return self.is_firefox()

    def uses_plan_b(self) -> bool:
        """Check if the browser negotiates with Plan B SDP."""
        return not self.uses_unified_plan()

    def supports_bandwidth_statistics(self) -> bool:
        """Check if upload and download bandwidth statistics are reported."""
        return not self.is_firefox() and not self.is_edge()

    def supports_rtt_statistics(self) -> bool:
        """Check if round trip time is reported for the ICE candidate pair.

        Firefox only reports mozRTT on RTP streams, and the value is not
        usable.
        """
        return not self.is_firefox() and not self.is_edge()

    def supports_data_channels(self) -> bool:
        """Check if WebRTC data channels are supported."""
        return not self.is_edge()

    def supports_rtp_sender(self) -> bool:
        """Check whether the browser supports the RTCRtpSender API."""
        return self.is_firefox()

    def supports_rtx(self) -> bool:
        """Check whether the browser supports RTX retransmission."""
        return not self.is_firefox()

    def supports_video_mute_on_conn_interrupted(self) -> bool:
        """Check if mute/unmute events fire when the connection is interrupted."""
        return self.is_chrome() or self.is_electron()

    def uses_new_gum_flow(self) -> bool:
        """Check if media should be acquired with the adapter-based getUserMedia flow."""
        return (
            (self.is_chrome() and not self.is_version_less_than("61"))
            or self.is_firefox()
            or self.is_safari_with_webrtc()
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "version": self.version,
            "in_iframe": self._in_iframe,
            "capabilities": dict(self._capabilities),
        }
