"""mksysimage: build bootable disk images from a kernel and filesystem sources.

Core design goals:
- Strictly ordered, single-shot pipeline
- Every host resource released in reverse order, on success and failure
- Full command log available for diagnosis
- raw images, or VirtualBox-converted vdi/vmdk/vhd
"""

__all__ = []
