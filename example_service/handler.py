"""Example handlers invoked by offline-schedule through `sls invoke local`."""

import json


def nightly_report(event, context):
    print(f"Building nightly report for {json.dumps(event)}")
    return {"status": "ok"}


def poll(event, context):
    print(f"Polling with {json.dumps(event)}")
    return {"status": "ok"}
