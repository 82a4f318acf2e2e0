"""Link event producers: synthetic traffic and trace replay."""

from linkstats.traffic.generator import LinkTrafficGenerator
from linkstats.traffic.replay import TraceRecord, TraceReplayer, load_trace

__all__ = ["LinkTrafficGenerator", "TraceRecord", "TraceReplayer", "load_trace"]
