# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""YAML rendering of the Datadog configuration."""

import sys
import yaml
from .models import DatadogConfig
from typing import Optional, TextIO


def render_datadog_config(config: DatadogConfig) -> str:
    """Render the configuration as a YAML document."""
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)


def write_datadog_config(config: DatadogConfig, stream: Optional[TextIO] = None) -> None:
    """Write the configuration to a stream, standard output by default."""
    stream = stream or sys.stdout
    stream.write(render_datadog_config(config))
    stream.flush()
