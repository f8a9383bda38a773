#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_cm_metrics - Check Hadoop metrics via the Cloudera Manager REST API

See the Charts section in Cloudera Manager or use --all-metrics for a given
--cluster --service [--roleId] or --hostId to see what's available.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NoReturn

from pydantic import BaseModel

from cmmetrics.checkers.checkresults import ActiveCheckResult, service_state_name
from cmmetrics.checkers.error_handling import check_result, handle_failure
from cmmetrics.cloudera_manager.api import (
    APIClientProto,
    ClouderaManagerAPI,
    ConnectionSettings,
    DEFAULT_PORT,
    DEFAULT_TLS_PORT,
)
from cmmetrics.cloudera_manager.evaluation import evaluate_thresholds, find_missing_metrics
from cmmetrics.cloudera_manager.report import make_report, make_role_listing
from cmmetrics.cloudera_manager.request import build_request, requested_metrics, RequestedMetrics
from cmmetrics.cloudera_manager.response import parse_metric_series, parse_roles
from cmmetrics.cloudera_manager.results import reduce_series
from cmmetrics.cloudera_manager.selectors import ClusterService, resolve_selector, Selector
from cmmetrics.cloudera_manager.validation import validate_hostname, validate_port, validate_user
from cmmetrics.utils import password_store
from cmmetrics.utils.exceptions import NoDataError, UsageError
from cmmetrics.utils.levels import Levels, validate_levels
from cmmetrics.utils.log import setup_logging
from cmmetrics.utils.timeout import Timeout

LOGGER = logging.getLogger("cmmetrics.check_cm_metrics")

APIFactory = Callable[[ConnectionSettings], APIClientProto]


class Args(BaseModel):
    host: str
    port: int
    user: str
    password: None | str
    password_reference: None | str
    tls: bool
    ssl_ca_path: None | str
    tls_noverify: bool
    metrics: None | str
    all_metrics: bool
    cluster: None | str
    service: None | str
    host_id: None | str
    activity: None | str
    nameservice: None | str
    role: None | str
    list_roles: bool
    warning: None | str
    critical: None | str
    timeout: int
    verbose: int
    debug: bool

    def resolve_secret(self) -> str:
        if self.password is not None:
            return self.password
        if self.password_reference is not None:
            try:
                pw_id, pw_file = password_store.split_reference(self.password_reference)
                return password_store.lookup(pw_file, pw_id)
            except password_store.PasswordStoreError as e:
                raise UsageError(str(e)) from e
        raise UsageError("no password specified, use --password or --password-reference")


class ArgParser(argparse.ArgumentParser):
    # command line errors are usage errors like any other
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


@dataclass(frozen=True)
class CheckConfig:
    selector: Selector
    metrics: RequestedMetrics
    list_roles: bool
    warning: Levels | None
    critical: Levels | None
    full_view: bool


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = ArgParser(prog="check_cm_metrics", description=__doc__)

    parser.add_argument("-H", "--host", required=True, help="Cloudera Manager host")
    parser.add_argument(
        "-P",
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Cloudera Manager port (defaults to {DEFAULT_PORT})",
    )
    parser.add_argument("-u", "--user", required=True, help="Cloudera Manager user")

    group = parser.add_mutually_exclusive_group()
    group.add_argument("-p", "--password", default=None, help="Cloudera Manager password")
    group.add_argument(
        "--password-reference",
        metavar="ID:FILE",
        default=None,
        help="Password store reference to the Cloudera Manager password",
    )

    parser.add_argument(
        "-T",
        "--tls",
        action="store_true",
        help=f"Use TLS connection to Cloudera Manager (automatically updates port to"
        f" {DEFAULT_TLS_PORT} if still set to {DEFAULT_PORT} to save one 302 redirect round trip)",
    )
    parser.add_argument(
        "--ssl-CA-path",
        dest="ssl_ca_path",
        metavar="DIRECTORY",
        default=None,
        help="Path to CA certificate directory (automatically enables --tls)",
    )
    parser.add_argument(
        "--tls-noverify",
        action="store_true",
        help="Do not verify TLS certificate from Cloudera Manager (automatically enables --tls)",
    )
    parser.add_argument(
        "-m",
        "--metrics",
        default=None,
        help="Metric(s) to fetch, comma separated (eg. dfs_capacity,dfs_capacity_used)."
        " Thresholds may optionally be applied if a single metric is given",
    )
    parser.add_argument(
        "-a",
        "--all-metrics",
        action="store_true",
        help="Fetch all metrics for the given service/host/role specified by the options below."
        " Caution, this could be a *lot* of metrics, best used to find available metrics",
    )
    parser.add_argument(
        "-C",
        "--cluster",
        default=None,
        help='Cluster Name shown in Cloudera Manager (eg. "Cluster - CDH4")',
    )
    parser.add_argument(
        "-S",
        "--service",
        default=None,
        help="Service Name shown in Cloudera Manager (eg. hdfs1, mapreduce4). Requires --cluster",
    )
    parser.add_argument(
        "-I",
        "--hostId",
        dest="host_id",
        default=None,
        help="HostId to collect metric for (eg. datanode1.domain.com)",
    )
    parser.add_argument(
        "-A",
        "--activityId",
        dest="activity",
        default=None,
        help="ActivityId to collect metric for. Requires --cluster and --service",
    )
    parser.add_argument(
        "-N",
        "--nameservice",
        default=None,
        help="Nameservice to collect metric for (as specified in your HA configuration under"
        " dfs.nameservices). Requires --cluster and --service",
    )
    parser.add_argument(
        "-R",
        "--roleId",
        dest="role",
        default=None,
        help="RoleId to collect metric for (eg. hdfs4-NAMENODE-73d774cdeca832ac6a648fa305019cef"
        " - use --list-roleIds to find the role ids for a given service)."
        " Requires --cluster and --service",
    )
    parser.add_argument(
        "--list-roleIds",
        dest="list_roles",
        action="store_true",
        help="List roleIds for a given cluster service, prints role ids and exits immediately."
        " Requires --cluster and --service",
    )
    parser.add_argument("-w", "--warning", default=None, help="Warning threshold or ran:ge (inclusive)")
    parser.add_argument(
        "-c", "--critical", default=None, help="Critical threshold or ran:ge (inclusive)"
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=10,
        help="Seconds before the check is aborted (Default: 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Verbose mode (for even more output use -vvv)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: request the full metric view and let Python exceptions come through",
    )

    return Args.model_validate(vars(parser.parse_args(argv)))


def make_connection_settings(args: Args) -> ConnectionSettings:
    host = validate_hostname(args.host)
    port = validate_port(args.port)
    user = validate_user(args.user)
    password = args.resolve_secret()

    verify: bool | str = True
    if args.tls_noverify:
        verify = False
    elif args.ssl_ca_path is not None:
        if not os.path.isdir(args.ssl_ca_path):
            raise UsageError(f"SSL CA directory '{args.ssl_ca_path}' not found")
        verify = args.ssl_ca_path

    use_tls = args.tls or args.tls_noverify or args.ssl_ca_path is not None
    if use_tls:
        LOGGER.info("TLS enabled: true")
        LOGGER.info("TLS noverify: %s", "true" if args.tls_noverify else "false")
        if port == DEFAULT_PORT:
            LOGGER.info(
                "overriding default http port %d to default tls port %d",
                DEFAULT_PORT,
                DEFAULT_TLS_PORT,
            )
            port = DEFAULT_TLS_PORT

    if args.timeout < 1:
        raise UsageError(f"invalid timeout given, must be at least one second, got {args.timeout}")

    return ConnectionSettings(
        host=host,
        port=port,
        use_tls=use_tls,
        verify=verify,
        user=user,
        password=password,
        timeout=args.timeout,
    )


def _parse_levels(text: str | None, name: str) -> Levels | None:
    if text is None:
        return None
    try:
        return Levels.parse(text)
    except ValueError as e:
        raise UsageError(f"invalid {name} threshold given: {e}") from e


def make_check_config(args: Args) -> CheckConfig:
    metrics = requested_metrics(
        args.metrics, all_metrics=args.all_metrics, list_roles=args.list_roles
    )
    selector = resolve_selector(
        cluster=args.cluster,
        service=args.service,
        host_id=args.host_id,
        activity=args.activity,
        nameservice=args.nameservice,
        role=args.role,
    )
    if args.list_roles and not isinstance(selector, ClusterService):
        raise UsageError("must define cluster and service to be able to list roles")

    warning = _parse_levels(args.warning, "warning")
    critical = _parse_levels(args.critical, "critical")
    try:
        validate_levels(warning, critical)
    except ValueError as e:
        raise UsageError(str(e)) from e

    return CheckConfig(
        selector=selector,
        metrics=metrics,
        list_roles=args.list_roles,
        warning=warning,
        critical=critical,
        full_view=args.debug,
    )


def check_cm_metrics(config: CheckConfig, api: APIClientProto) -> ActiveCheckResult:
    request = build_request(
        config.selector,
        config.metrics,
        list_roles=config.list_roles,
        full_view=config.full_view,
    )
    response = api.get(request)

    if request.list_roles:
        assert isinstance(config.selector, ClusterService)
        return make_role_listing(
            config.selector.cluster, config.selector.service, parse_roles(response)
        )

    LOGGER.info("parsing output from Cloudera Manager")
    if not (
        results := reduce_series(parse_metric_series(response), config.selector.scope_values)
    ):
        raise NoDataError(
            f"no metrics returned by Cloudera Manager '{api.url_prefix}', no metrics collected in"
            " last 5 mins or incorrect cluster/service/role/host for the given metric(s)?"
        )

    return make_report(
        results,
        state=evaluate_thresholds(
            config.metrics, results, warning=config.warning, critical=config.critical
        ),
        not_found=find_missing_metrics(config.metrics, results),
    )


def _check_cm_metrics_main(argv: Sequence[str], api_factory: APIFactory) -> ActiveCheckResult:
    try:
        args = parse_arguments(argv)
    except UsageError as exc:
        return handle_failure(exc, debug=False)
    setup_logging(args.verbose)

    def _check() -> ActiveCheckResult:
        settings = make_connection_settings(args)
        config = make_check_config(args)
        with Timeout(
            settings.timeout,
            message=f"Timed out after {settings.timeout} seconds"
            f" while querying Cloudera Manager at '{settings.url_prefix}'",
        ):
            return check_cm_metrics(config, api_factory(settings))

    result = check_result(_check, debug=args.debug)
    LOGGER.info("state: %s", service_state_name(result.state))
    return result


def _output_check_result(s: str) -> None:
    sys.stdout.write("%s\n" % s)


def main(
    argv: Sequence[str] | None = None,
    api_factory: APIFactory | None = None,
) -> int:
    result = _check_cm_metrics_main(
        sys.argv[1:] if argv is None else argv, api_factory or ClouderaManagerAPI
    )
    _output_check_result(result.as_text())
    return result.state


if __name__ == "__main__":
    sys.exit(main())
