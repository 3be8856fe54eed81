from macroapi.application.port import ChunkExecutor, ExecutorFactory, TargetResolver
from macroapi.domain.port import Environment
from macroapi.domain.value_object import RunOptions
from macroapi.infrastructure.adapter.threaded.chunk_executor import ThreadedChunkExecutor
from macroapi.infrastructure.adapter.threaded.task_runner import ContextTaskRunner


class ThreadedExecutorFactory(ExecutorFactory):
    def __init__(self, resolver: TargetResolver):
        self.resolver = resolver

    def get_executor(self, environment: Environment, options: RunOptions) -> ChunkExecutor:
        """
        Build a chunk executor whose task runners start contexts in ``environment``.

        :param environment: The environment acquired for the run
        :type environment: Environment
        :param options: The run options; supplies the task timeout and message forwarding
        :type options: RunOptions
        :returns: A threaded chunk executor
        :rtype: ChunkExecutor
        """
        task_runner = ContextTaskRunner(
            environment,
            self.resolver,
            timeout=options.task_timeout,
            show_messages=options.show_messages,
        )
        return ThreadedChunkExecutor(task_runner)
