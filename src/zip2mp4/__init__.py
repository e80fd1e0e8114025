"""zip2mp4: convert zipped frame sequences into MP4 videos."""

__version__ = "0.1.0"
