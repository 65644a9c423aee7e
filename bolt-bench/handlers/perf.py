"""
Performance benchmarks comparing Bolt with direct S3 access.

Every operation is sent to both backends with identical parameters. Put,
delete and get run per key, S3 then Bolt back to back, so network variance
hits both backends within the same small window; list runs as two separate
passes of a fixed number of iterations.
"""

import logging
from typing import Any, Dict, List, Tuple

from configuration import LIST_ITERATIONS, LIST_MAX_KEYS
from common.errors import PerfStatsError, error_response
from common.events import PerfRequest
from common.generators import generate, generate_key_names
from common.integrity import is_gzip_encoded
from common.metrics_utils import compute_perf_stats, now, elapsed_ms
from common.request_types import PerfRequestType, SdkType
from common.storage_factory import create_storage_system
from systems.base import read_body

logger = logging.getLogger(__name__)

PerfResults = Dict[str, Dict[str, Any]]


async def timed(call, *args, **kwargs) -> Tuple[Any, float]:
    """Await ``call(*args, **kwargs)`` and return (result, latency in ms)."""
    start = now()
    result = await call(*args, **kwargs)
    return result, elapsed_ms(start)


class BoltS3Perf:
    """Runs the performance benchmarks for one event."""

    def __init__(self):
        self.s3_client = None
        self.bolt_client = None
        self.num_keys = 0
        self.obj_length = 0

    async def process_event(self, event: Dict[str, Any]) -> PerfResults:
        """Run the requested benchmark(s) and return perf stats per backend.

        If any step fails the whole result is replaced by an error map.

        Raises:
            InvalidRequestError: If requestType, numKeys or objLength is malformed;
                raised before any SDK call
        """
        request = PerfRequest.from_event(event)
        self.num_keys = request.num_keys
        self.obj_length = request.obj_length

        logger.info(
            f"Starting {request.request_type.name} benchmark on {request.bucket} "
            f"(numKeys={self.num_keys}, objLength={self.obj_length})"
        )

        try:
            request.check_required()
            async with create_storage_system(SdkType.S3) as s3_system, \
                    create_storage_system(SdkType.BOLT) as bolt_system:
                self.s3_client = s3_system.client
                self.bolt_client = bolt_system.client
                results = await self.run(request.request_type, request.bucket)
        except Exception as e:
            return error_response(e)
        finally:
            self.s3_client = None
            self.bolt_client = None

        logger.info(f"Finished {request.request_type.name} benchmark")
        return results

    async def run(self, request_type: PerfRequestType, bucket: str) -> PerfResults:
        if request_type == PerfRequestType.LIST_OBJECTS_V2:
            return await self.list_objects_v2_perf(bucket)

        if request_type == PerfRequestType.PUT_OBJECT:
            return await self.put_object_perf(bucket, generate_key_names(self.num_keys))

        if request_type == PerfRequestType.DELETE_OBJECT:
            return await self.delete_object_perf(bucket, generate_key_names(self.num_keys))

        if request_type.is_get:
            keys = await self.list_keys(bucket, passthrough=request_type.is_passthrough)
            return await self.get_object_perf(
                bucket, keys, ttfb=request_type.is_ttfb, passthrough=request_type.is_passthrough
            )

        if request_type == PerfRequestType.ALL:
            return await self.all_perf(bucket)

        return {}

    async def all_perf(self, bucket: str) -> PerfResults:
        """Put, delete and list benchmarks, then a get benchmark on the objects still listed.

        The generated objects are deleted before the get keys are discovered,
        so the get benchmark reads whatever already lived in the bucket.
        """
        keys = generate_key_names(self.num_keys)

        results = {}
        results.update(await self.put_object_perf(bucket, keys))
        results.update(await self.delete_object_perf(bucket, keys))
        results.update(await self.list_objects_v2_perf(bucket))

        get_keys = await self.list_keys(bucket)
        results.update(await self.get_object_perf(bucket, get_keys))
        return results

    async def list_keys(self, bucket: str, passthrough: bool = False) -> List[str]:
        """Up to ``num_keys`` object keys of the bucket, skipping directory markers.

        Passthrough buckets are not monitored by Bolt, so they are listed on S3.
        """
        client = self.s3_client if passthrough else self.bolt_client
        response = await client.list_objects_v2(Bucket=bucket, MaxKeys=self.num_keys)
        keys = [obj["Key"] for obj in response.get("Contents", []) if not obj["Key"].endswith("/")]
        logger.info(f"Found {len(keys)} objects in {bucket}")
        return keys

    async def list_objects_v2_perf(self, bucket: str, num_iter: int = LIST_ITERATIONS) -> PerfResults:
        """List up to 1000 objects ``num_iter`` times from S3, then from Bolt."""
        results = {}
        for name, client in (("s3", self.s3_client), ("bolt", self.bolt_client)):
            list_times = []
            list_tp = []
            for _ in range(num_iter):
                response, latency_ms = await timed(
                    client.list_objects_v2, Bucket=bucket, MaxKeys=LIST_MAX_KEYS
                )
                list_times.append(latency_ms)
                list_tp.append(response.get("KeyCount", 0) / latency_ms)

            results[f"{name}_list_objects_v2_perf_stats"] = compute_perf_stats(list_times, list_tp)
        return results

    async def put_object_perf(self, bucket: str, keys: List[str]) -> PerfResults:
        """Upload a random value of ``obj_length`` bytes per key to S3 and Bolt."""
        s3_put_times = []
        bolt_put_times = []

        for key in keys:
            body = generate(self.obj_length).encode()

            _, latency_ms = await timed(self.s3_client.put_object, Bucket=bucket, Key=key, Body=body)
            s3_put_times.append(latency_ms)

            _, latency_ms = await timed(self.bolt_client.put_object, Bucket=bucket, Key=key, Body=body)
            bolt_put_times.append(latency_ms)

        return {
            "s3_put_obj_perf_stats": compute_perf_stats(s3_put_times),
            "bolt_put_obj_perf_stats": compute_perf_stats(bolt_put_times),
        }

    async def delete_object_perf(self, bucket: str, keys: List[str]) -> PerfResults:
        s3_del_times = []
        bolt_del_times = []

        for key in keys:
            _, latency_ms = await timed(self.s3_client.delete_object, Bucket=bucket, Key=key)
            s3_del_times.append(latency_ms)

            _, latency_ms = await timed(self.bolt_client.delete_object, Bucket=bucket, Key=key)
            bolt_del_times.append(latency_ms)

        return {
            "s3_del_obj_perf_stats": compute_perf_stats(s3_del_times),
            "bolt_del_obj_perf_stats": compute_perf_stats(bolt_del_times),
        }

    async def get_object_perf(
        self, bucket: str, keys: List[str], ttfb: bool = False, passthrough: bool = False
    ) -> PerfResults:
        """Get every key from S3 and Bolt.

        With ``ttfb`` only the first byte of each body is read, which measures
        time to first byte instead of the full transfer.
        """
        if not keys:
            raise PerfStatsError(f"No objects to get from bucket {bucket}")

        amt = 1 if ttfb else None
        suffix = "get_obj" + ("_passthrough" if passthrough else "") + ("_ttfb" if ttfb else "")

        async def get(client, key):
            response = await client.get_object(Bucket=bucket, Key=key)
            await read_body(response, amt)
            return response

        stats = {
            name: {"times": [], "sizes": [], "compressed": 0, "uncompressed": 0}
            for name in ("s3", "bolt")
        }

        for key in keys:
            for name, client in (("s3", self.s3_client), ("bolt", self.bolt_client)):
                response, latency_ms = await timed(get, client, key)

                backend_stats = stats[name]
                backend_stats["times"].append(latency_ms)
                backend_stats["sizes"].append(response.get("ContentLength", 0))
                if is_gzip_encoded(response.get("ContentEncoding"), key):
                    backend_stats["compressed"] += 1
                else:
                    backend_stats["uncompressed"] += 1

        results = {}
        for name, backend_stats in stats.items():
            perf_stats = compute_perf_stats(backend_stats["times"], obj_sizes=backend_stats["sizes"])
            perf_stats["compressedObjects"] = str(backend_stats["compressed"])
            perf_stats["uncompressedObjects"] = str(backend_stats["uncompressed"])
            results[f"{name}_{suffix}_perf_stats"] = perf_stats
        return results
