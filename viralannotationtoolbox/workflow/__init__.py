"""
The workflow subpackage prepares a run of the consensus annotation pipeline. The pipeline itself
is executed by Nextflow; this package only decides what Nextflow is told:

1. The **parameters**: defaults, a configuration file, and command-line overrides, validated once.
2. The **ceilings**: the largest CPU count, memory size and time any process may request.
3. The **process defaults**: per-label requests clamped to the ceilings, with a single retry when
   a process is killed by the scheduler.
4. The **profiles**: mutually exclusive container backends and cluster schedulers.
"""
