#!/usr/bin/env python3
"""
ヘッドレスWordPress管理 メインスクリプト
"""
import sys
import argparse

from headless_admin.core.admin_app import AdminApp
from headless_admin.services.exceptions import HeadlessAdminError, ConfigurationError


def parse_arguments(argv=None):
    """コマンドライン引数を解析"""
    parser = argparse.ArgumentParser(
        description='ヘッドレスWordPress管理クライアント',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  python main.py                                # 投稿一覧（ホーム）
  python main.py /posts --page 2 --search news  # 投稿一覧の2ページ目を検索
  python main.py /posts/12                      # 投稿の詳細
  python main.py /projects                      # カスタム投稿タイプの一覧
  python main.py /profiles                      # ユーザー一覧
  python main.py --create --title "Hello" --content "<p>本文</p>" --post-status publish
  python main.py --test-connection              # 接続テストのみ実行
  python main.py --status                       # システム状態表示
        """
    )

    parser.add_argument(
        'path',
        nargs='?',
        default='/',
        help='表示するパス (デフォルト: /)'
    )

    parser.add_argument(
        '--env-file', '-e',
        default='.env',
        help='.envファイルのパス (デフォルト: .env)'
    )

    parser.add_argument('--page', type=int, default=None, help='一覧のページ番号')
    parser.add_argument('--per-page', type=int, default=None, help='1ページの件数')
    parser.add_argument('--search', default=None, help='一覧の検索キーワード')

    parser.add_argument(
        '--create',
        action='store_true',
        help='新規投稿を作成'
    )
    parser.add_argument('--title', default=None, help='投稿タイトル (--create)')
    parser.add_argument('--content', default=None, help='投稿本文 HTML (--create)')
    parser.add_argument('--excerpt', default=None, help='投稿の抜粋 (--create)')
    parser.add_argument('--slug', default=None, help='投稿スラッグ (--create)')
    parser.add_argument(
        '--post-status',
        default=None,
        metavar='POST_STATUS',
        help='投稿ステータス (--create, デフォルト: draft)'
    )

    parser.add_argument(
        '--status', '-s',
        action='store_true',
        help='システム状態を表示'
    )

    parser.add_argument(
        '--test-connection', '-t',
        action='store_true',
        help='接続テストのみ実行'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを出力'
    )

    args = parser.parse_args(argv)

    if not args.create:
        create_only = [
            option for option, value in (
                ('--title', args.title), ('--content', args.content), ('--excerpt', args.excerpt),
                ('--slug', args.slug), ('--post-status', args.post_status)
            ) if value is not None
        ]
        if create_only:
            parser.error(f"{', '.join(create_only)} は --create と併用してください")

    return args


def main(argv=None):
    """メイン処理"""
    try:
        args = parse_arguments(argv)

        with AdminApp(env_file=args.env_file, verbose=args.verbose) as app:
            if args.test_connection:
                success = app.test_connection()
                print("✅ 接続成功" if success else "❌ 接続失敗")
                return 0 if success else 1

            if args.create:
                result = app.create_post(
                    args.title,
                    args.content,
                    status=args.post_status,
                    excerpt=args.excerpt,
                    slug=args.slug
                )
                if result["success"]:
                    print(f"✅ 投稿を作成しました: ID {result['post_id']} ({result['status']})")
                    if result.get('post_url'):
                        print(f"🔗 {result['post_url']}")
                    return 0
                print(f"❌ 投稿に失敗しました: {result['error']}", file=sys.stderr)
                return 1

            if args.status:
                app.display_status()
                return 0

            print(app.render(args.path, page=args.page, per_page=args.per_page, search=args.search))
            return 0 if app.is_known_path(args.path) else 1

    except ConfigurationError as e:
        print(f"設定エラー: {e}", file=sys.stderr)
        return 1
    except HeadlessAdminError as e:
        print(f"システムエラー: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n処理が中断されました", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
