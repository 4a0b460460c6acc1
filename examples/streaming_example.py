#!/usr/bin/env python3
"""
Seewo Python SDK - Live Streaming Example

Signs a request offline to show the x-sw-* headers, then, when SEEWO_APP_ID
and SEEWO_APP_SECRET are set, starts and stops streaming on a device and
lists the recorded videos.
"""

import json
import os
import sys

from seewo_sdk import (
    SeewoClient,
    SeewoRequest,
    SigningOptions,
    HttpMethod,
    SignType,
    create_client,
    OtherDeviceV1StreamingStartRequest,
    OtherDeviceV1StreamingStopRequest,
    StreamingVideosRequest,
    SeewoSDKError,
)


def offline_signing_example():
    """Show the signed headers for a request without sending it"""
    print("=== Offline Signing Example ===")

    with create_client("demo-app", "demo-secret", sign_type=SignType.MD5, stage="Development") as client:
        request = SeewoRequest(
            method=HttpMethod.GET,
            uri="/live/resource/v1/videos",
            queries={"bizId": "demo-biz"},
        )
        signed = client.sign_only(request, SigningOptions(timestamp=1700000000000))

        print(f"URL: {client.build_url(request)}")
        print(f"Signing string: {signed.signing_string}")
        print(json.dumps(signed.headers, indent=2))


def live_streaming_example(device_sn: str, biz_id: str):
    """Start, stop and list recordings against the configured stage"""
    print("\n=== Live Streaming Example ===")

    with SeewoClient.from_env() as client:
        started = OtherDeviceV1StreamingStartRequest(device_sn=device_sn, biz_id=biz_id).invoke(client)
        print(f"start: code={started.body.code} request_id={started.request_id}")

        stopped = OtherDeviceV1StreamingStopRequest(device_sn=device_sn).invoke(client)
        print(f"stop: code={stopped.body.code} request_id={stopped.request_id}")

        videos = StreamingVideosRequest(biz_id=biz_id).invoke(client)
        for video in videos.body.data:
            print(f"  {video.name or '(unnamed)'}: {video.duration}, {video.size_in_kb} KB, {video.url}")


def main():
    offline_signing_example()

    if not (os.environ.get("SEEWO_APP_ID") and os.environ.get("SEEWO_APP_SECRET")):
        print("\nSet SEEWO_APP_ID and SEEWO_APP_SECRET to run the live example.")
        return 0

    try:
        live_streaming_example(
            device_sn=os.environ.get("SEEWO_DEVICE_SN", "48SV31V010103823800166"),
            biz_id=os.environ.get("SEEWO_BIZ_ID", "demo-biz"),
        )
    except SeewoSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
