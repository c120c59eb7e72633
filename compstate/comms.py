"""UDP motion controller used by the path procedures.

Packet (cmd_port): (distance, angle_deg) as 2 x float32, '<2f'.
`stop()` sends a short burst of zeros so the receiver sees a clean stop.
"""

from __future__ import annotations

import socket
import struct
import time
from threading import Lock

CMD_FORMAT = "<2f"


def pack_command(distance: float, angle_deg: float) -> bytes:
    return struct.pack(CMD_FORMAT, float(distance), float(angle_deg))


class UDPMotionController:
    def __init__(
        self,
        ip: str,
        cmd_port: int = 50001,
        log_packets: bool = False,
        stop_burst: int = 4,
        stop_spacing_s: float = 0.03,
    ) -> None:
        self.ip = str(ip)
        self.cmd_port = int(cmd_port)
        self.log_packets = bool(log_packets)
        self.stop_burst = max(1, int(stop_burst))
        self.stop_spacing_s = max(0.0, float(stop_spacing_s))

        # Traversal and object-move threads may share one controller.
        self._lock = Lock()
        self._sock: socket.socket | None = None
        self.last_command: tuple[float, float] = (0.0, 0.0)

    def ensure_socket(self) -> None:
        if self._sock is None:
            s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            s.setblocking(False)
            self._sock = s

    def shutdown(self) -> None:
        with self._lock:
            if self._sock is not None:
                try:
                    self._sock.close()
                except OSError:
                    pass
                self._sock = None

    def send(self, distance: float, angle_deg: float) -> None:
        with self._lock:
            self.ensure_socket()
            self._send_cmd(distance, angle_deg)

    def stop(self) -> None:
        for _ in range(self.stop_burst):
            self.send(0.0, 0.0)
            time.sleep(self.stop_spacing_s)

    def _send_cmd(self, distance: float, angle_deg: float) -> None:
        payload = pack_command(distance, angle_deg)
        self.last_command = (float(distance), float(angle_deg))
        assert self._sock is not None
        try:
            self._sock.sendto(payload, (self.ip, self.cmd_port))
        except OSError as exc:
            # Non-blocking UDP: drop the packet, the next cycle resends.
            print(f"[UDP CMD -> {self.ip}:{self.cmd_port}] send failed: {exc}")
            return
        if self.log_packets:
            print(f"[UDP CMD -> {self.ip}:{self.cmd_port}] distance={distance:.2f} angle={angle_deg:.2f} deg")
