# deploystate

Start and stop an application on the foundations of a configured environment.
Lifecycle events are emitted along the way, and failures become HTTP-style
responses.

## Modules

- `deploystate.structs` holds the plain data records: `DeploymentInfo`,
  `Environment`, `ErrorMatcherDescriptor`, `DeployEventData`,
  `PrecheckerEventData`, `PushEventData`, `StopEventData`, `CFContext`,
  `Authorization`, `Deployment`, `DeployResponse` and `Config`. It also holds
  `DeploymentLogger`, which wraps a `logging.Logger` together with the UUID of
  one deployment and offers `debug`, `info` and `error`.
- `deploystate.events` holds the lifecycle events:
  - `StartStartedEvent`, `StartSuccessEvent`, `StartFailureEvent` and
    `StartFinishedEvent`.
  - `StopStartedEvent`, `StopSuccessEvent`, `StopFailureEvent` and
    `StopFinishedEvent`.

  Each event has a `name` property that returns its class name. The
  `EventBinding` objects are built with `new_start_started_event_binding(handler)`
  and the other `new_*_event_binding` functions. `accepts(event)` is true only
  for the exact event type of the binding. `emit(event)` calls the handler and
  returns what the handler returns. It raises `InvalidEventType` for any other
  event, and also when the binding has no handler.
- `deploystate.actions` holds `Starter` and `Stopper`, the actions that run on
  one foundation:
  - `initially()` logs in through the courier.
  - `execute()` checks that the app exists, then starts it (`Starter`) or
    stops it (`Stopper`).
  - `undo()` reverses that step.

  `verify()`, `success()` and `finally_()` only log that there is nothing to
  do. Command output is written to the response stream.
- `deploystate.managers` holds `StartManager` and `StopManager`:
  - `create(environment, response, foundation_url)` builds an action for one
    foundation. If the courier cannot be created it raises
    `CourierCreationError`.
  - `on_finish(env, response, err)` returns a `DeployResponse`. The status is
    200 on success, and the text "Your start was successful!" or "Your stop
    was successful!" is written to the response. It is 400 when the error
    message contains "login failed", and 500 for any other error.
  - `initially_error`, `execute_error`, `undo_error` and `success_error` wrap
    the errors they collect as `LoginError`, `StartError`/`StopError`,
    `RollbackStartError`/`RollbackStopError` and
    `FinishStartError`/`FinishStopError`.
- `deploystate.controllers` holds `StartController.start_deployment(deployment,
  data, response)` and `StopController.stop_deployment(deployment, data,
  response)`. Each call does the following:
  - It looks up the environment. An unknown environment gives 500 with
    `EnvironmentNotFoundError`.
  - It resolves credentials. Empty credentials give 401 with `BasicAuthError`
    when the environment requires authentication. Otherwise the defaults from
    `Config` are used.
  - It emits the started event. If that fails the result is 500 with an
    `EventError`.
  - It asks the manager factory for a manager and hands the work to the
    deployer.
  - It then emits a success or failure event, and after that the finished
    event.

  On failure, the error finder is given the response text. Each known error
  it finds is appended to the response with its details and a potential
  solution. The first one found becomes the response's error.
- `deploystate.errors` holds every exception above. All of them derive from
  `DeployError`.

## Collaborators you supply

The package does its work through plain objects that you pass in:

- a courier creator with `create_courier()`, which returns a courier that has
  `login(foundation_url, username, password, org, space, skip_ssl)`,
  `exists(app_name)`, `start(app_name)` and `stop(app_name)`. Failures are
  raised as exceptions, which may carry an `output` attribute.
- an event manager with `emit_event(event)`
- a deployer with `deploy(deployment_info, environment, action_creator, response)`
- an error finder with `find_errors(text)`
- a manager factory with `start_manager(log, deploy_event_data)` or
  `stop_manager(log, deploy_event_data)`

## Example

```python
import io

from deploystate.managers import StopManager
from deploystate.structs import DeployEventData, DeploymentInfo, Environment


class Courier:
    def login(self, foundation_url, username, password, org, space, skip_ssl):
        return b"logged in\n"

    def exists(self, app_name):
        return True

    def start(self, app_name):
        return b"started\n"

    def stop(self, app_name):
        return b"stopped\n"


class Creator:
    def create_courier(self):
        return Courier()


manager = StopManager(
    courier_creator=Creator(),
    deploy_event_data=DeployEventData(deployment_info=DeploymentInfo(app_name="my-app")),
)
out = io.BytesIO()
stopper = manager.create(Environment(name="dev"), out, "https://api.example.com")
stopper.initially()
stopper.execute()

result = manager.on_finish(Environment(name="dev"), out, None)
assert result.status_code == 200
assert b"Your stop was successful!" in out.getvalue()
```

## What it does not do

The package does not include any of the following:

- a client for a real platform: no courier that runs login, start or stop
  commands
- no event manager, no deployer that runs actions across foundations, and no
  error finder
- no HTTP server and no command-line program

You provide these pieces yourself, as described above.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```