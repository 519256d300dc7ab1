ANONYMOUS = "anonymous"
MiB = 1024 * 1024
